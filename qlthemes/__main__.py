"""Allow ``python -m qlthemes``."""

from qlthemes.cli import main

main()
