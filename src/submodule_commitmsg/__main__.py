import sys

from submodule_commitmsg.cli import main

sys.exit(main())
