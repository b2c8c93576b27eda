import sys

from vgcsite.main import main

sys.exit(main())
