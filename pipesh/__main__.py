import sys

from pipesh.shell import main

sys.exit(main())
