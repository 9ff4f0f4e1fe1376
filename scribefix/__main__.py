import sys

from scribefix.cli import main

sys.exit(main())
