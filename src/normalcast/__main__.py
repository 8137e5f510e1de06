import sys

from normalcast.cli import main

sys.exit(main())
