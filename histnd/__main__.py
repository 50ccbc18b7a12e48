import sys

from histnd.run import main

sys.exit(main())
