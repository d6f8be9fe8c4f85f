import sys

from territory_war.cli import main

sys.exit(main())
