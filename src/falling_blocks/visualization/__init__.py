"""pygame front end: renderer, line-clear effects and the keyboard play loop."""
