import sys

from namedsql.cli import main

sys.exit(main())
