import sys

from urlregistry.cli import main


sys.exit(main())
