"""Allow ``python -m quizengine``."""

from .cli import main

main()
