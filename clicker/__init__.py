"""Button Clicker game backend."""
