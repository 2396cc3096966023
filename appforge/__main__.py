import sys

from appforge.cli import main

sys.exit(main())
