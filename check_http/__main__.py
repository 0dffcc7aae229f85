import sys

from check_http.cli import main

sys.exit(main())
