"""WriteSpace blogging platform backend."""
