import sys

from crm_assistant.cli import main

sys.exit(main())
