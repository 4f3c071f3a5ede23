import sys

from static_ldd.main import main

sys.exit(main())
