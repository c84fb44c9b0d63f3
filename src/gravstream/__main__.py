import sys

from gravstream.cli import main

sys.exit(main())
