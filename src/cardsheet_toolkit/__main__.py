import sys

from cardsheet_toolkit.cli import main

sys.exit(main())
