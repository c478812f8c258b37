import sys

from ring_cli.repl import main

sys.exit(main())
