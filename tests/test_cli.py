"""End-to-end tests of the command line entry point with a fake lipo/rsync."""

from pathlib import Path

import pytest
import yaml

from fakes import FakeToolRunner, read_archs, write_binary
from makeuniversal.cli import build_parser, main


def populate(trees) -> None:
    primary, secondary, _ = trees
    write_binary(primary / "bin" / "app", "x86_64")
    write_binary(secondary / "bin" / "app", "arm64")
    write_binary(primary / "lib" / "libfat.dylib", "x86_64", "arm64")
    (primary / "share").mkdir()
    (primary / "share" / "notes.txt").write_text("notes\n", encoding="utf-8")


def argv(trees, *extra: str) -> list:
    primary, secondary, destination = trees
    return [*extra, str(destination), str(primary), str(secondary)]


@pytest.mark.parametrize("count", [0, 2, 4])
def test_wrong_argument_count_is_usage_error(tmp_path: Path, count: int) -> None:
    runner = FakeToolRunner()
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path)] * count, runner=runner)
    assert excinfo.value.code == 2
    assert runner.calls == []


def test_missing_source_tree(trees) -> None:
    primary, secondary, destination = trees
    runner = FakeToolRunner()
    with pytest.raises(SystemExit, match="secondary tree is not a directory"):
        main([str(destination), str(primary), str(secondary / "nope")], runner=runner)
    assert runner.calls == []


def test_full_run(trees, captured_log) -> None:
    populate(trees)
    destination = trees[2]
    runner = FakeToolRunner()

    assert main(argv(trees), runner=runner) == 0

    assert read_archs(destination / "bin" / "app") == ["x86_64", "arm64"]
    assert read_archs(destination / "lib" / "libfat.dylib") == ["x86_64", "arm64"]
    assert (destination / "share" / "notes.txt").read_text(encoding="utf-8") == "notes\n"
    assert runner.calls[0][0] == "rsync"
    assert "Total binaries: 2, Skipped: 1, Failed: 0" in captured_log.text


def test_report_written(trees, tmp_path: Path) -> None:
    populate(trees)
    report = tmp_path / "reports" / "universal.yml"

    assert main(argv(trees, "--report", str(report)), runner=FakeToolRunner()) == 0

    data = yaml.safe_load(report.read_text(encoding="utf-8"))
    assert data["totals"] == {"binaries": 2, "merged": 1, "skipped": 1, "failed": 0, "unresolvable": 0}
    assert data["files"] == [
        {"path": "bin/app", "outcome": "merged"},
        {"path": "lib/libfat.dylib", "outcome": "skipped"},
    ]


def test_merge_failures_still_exit_zero(trees) -> None:
    populate(trees)
    destination = trees[2]
    runner = FakeToolRunner(fail_create=[destination.absolute() / "bin" / "app"])

    assert main(argv(trees), runner=runner) == 0
    assert read_archs(destination / "bin" / "app") == ["x86_64"]


def test_replication_failure_is_fatal(trees, captured_log) -> None:
    populate(trees)
    runner = FakeToolRunner(rsync_status=23)

    assert main(argv(trees), runner=runner) == 1
    assert [call[0] for call in runner.calls] == ["rsync"]
    assert "not creating universal binaries" in captured_log.text


def test_allow_partial_copy_continues(trees, captured_log) -> None:
    populate(trees)
    destination = trees[2]
    write_binary(destination / "bin" / "app", "x86_64")
    runner = FakeToolRunner(rsync_status=23)

    assert main(argv(trees, "--allow-partial-copy"), runner=runner) == 0
    assert read_archs(destination / "bin" / "app") == ["x86_64", "arm64"]
    assert "merging whatever was copied" in captured_log.text


def test_config_file_supplies_tools(trees, tmp_path: Path) -> None:
    populate(trees)
    config = tmp_path / "settings.yml"
    config.write_text("lipo: /usr/bin/lipo\nrsync: /usr/bin/rsync\n", encoding="utf-8")
    runner = FakeToolRunner(missing_tools=["/usr/bin/rsync"])

    assert main(argv(trees, "--config", str(config)), runner=runner) == 1
    assert runner.calls[0][0] == "/usr/bin/rsync"


def test_secondary_arch_option(trees) -> None:
    primary, secondary, destination = trees
    write_binary(primary / "app", "arm64")
    write_binary(secondary / "app", "x86_64")
    runner = FakeToolRunner()

    code = main(argv(trees, "--primary-arch", "arm64", "--secondary-arch", "x86_64"), runner=runner)

    assert code == 0
    assert read_archs(destination / "app") == ["arm64", "x86_64"]
    assert runner.calls[1] == ["lipo", str(destination / "app"), "-verify_arch", "x86_64"]


def test_unknown_arch_option_is_usage_error(trees) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(argv(trees, "--secondary-arch", "ppc"), runner=FakeToolRunner())
    assert excinfo.value.code == 2


def test_parser_defaults() -> None:
    args = build_parser().parse_args(["u", "x", "a"])
    assert args.allow_partial_copy is None
    assert args.timeout is None
    assert args.report is None


@pytest.mark.parametrize("value", ["inf", "nan", "-1"])
def test_bad_timeout_option_stops_before_any_work(trees, value: str) -> None:
    runner = FakeToolRunner()
    with pytest.raises(SystemExit, match="timeout must be"):
        main(argv(trees, "--timeout", value), runner=runner)
    assert runner.calls == []
    assert not trees[2].exists()
