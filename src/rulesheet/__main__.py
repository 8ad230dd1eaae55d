import sys

from rulesheet.cli import main

sys.exit(main())
