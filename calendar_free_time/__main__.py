import sys

from calendar_free_time.cli import main

sys.exit(main())
