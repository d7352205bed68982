import sys

from cookie_crawler.main import main

sys.exit(main())
