import sys

from VehicleViz.App import main

sys.exit(main())
