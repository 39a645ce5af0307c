import sys

from rustcov.cli import main

sys.exit(main())
