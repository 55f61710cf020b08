import sys

from bigs.cli import main

sys.exit(main())
