import sys

from tzlab.cli import main

sys.exit(main())
