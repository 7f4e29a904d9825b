import sys

from geoweather.cli import main

sys.exit(main())
