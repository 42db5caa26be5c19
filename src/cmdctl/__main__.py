import sys

from cmdctl.cli.main import main

sys.exit(main())
