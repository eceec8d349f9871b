import sys

from .deployer import main

sys.exit(main())
