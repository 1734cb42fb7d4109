import sys

from makeuniversal.cli import main

sys.exit(main())
