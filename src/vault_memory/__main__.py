import sys

from vault_memory.cli import main

sys.exit(main())
