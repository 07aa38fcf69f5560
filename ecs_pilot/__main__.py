import sys

from ecs_pilot.main import main

sys.exit(main())
