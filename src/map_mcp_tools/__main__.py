import sys

from map_mcp_tools.cli import main

sys.exit(main())
