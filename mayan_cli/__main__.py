import sys

from mayan_cli.cli import main

sys.exit(main())
