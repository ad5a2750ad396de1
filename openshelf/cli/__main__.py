"""Allow ``python -m openshelf.cli`` execution."""

from openshelf.cli.browse import main

main()
