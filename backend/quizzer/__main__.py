import sys

from quizzer.cli import main

sys.exit(main())
