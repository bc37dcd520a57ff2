import sys

from .cli.process_image import main

sys.exit(main())
