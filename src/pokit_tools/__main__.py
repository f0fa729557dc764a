"""コマンドラインのエントリーポイント"""

import sys

from pokit_tools.cli import main

sys.exit(main())
