"""Allow ``python -m yieldpilot``."""

from yieldpilot.main import main

main()
