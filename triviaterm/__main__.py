import sys

from triviaterm.main_tui import main

sys.exit(main())
