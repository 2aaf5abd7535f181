import sys

from ansipic.cli import main

sys.exit(main())
