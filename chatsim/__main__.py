import sys

from chatsim.client import main

sys.exit(main())
