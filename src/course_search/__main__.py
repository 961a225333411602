import sys

from course_search.cli import main


sys.exit(main())
