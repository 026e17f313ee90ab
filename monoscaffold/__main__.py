"""Allow ``python -m monoscaffold``."""

from monoscaffold.pipeline import main

main()
