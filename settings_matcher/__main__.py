import sys

from settings_matcher.cli import main

sys.exit(main())
