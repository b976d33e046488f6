import sys

from envscope.cli.main import main

sys.exit(main())
