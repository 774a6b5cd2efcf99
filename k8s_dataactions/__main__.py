import sys

from .libs.main_app import main

sys.exit(main())
