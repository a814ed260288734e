import sys

from weatherfeed.cli import main

sys.exit(main())
