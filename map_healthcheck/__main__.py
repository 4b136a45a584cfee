import sys

from map_healthcheck.cli import main

sys.exit(main())
