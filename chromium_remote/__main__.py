import sys
from chromium_remote.cli import main

sys.exit(main())
