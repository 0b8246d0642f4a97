import sys
from midi2mml.midi2mmlcmd import main

sys.exit(main())
