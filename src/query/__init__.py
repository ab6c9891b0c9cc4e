"""Order search — optional criteria composed into a single predicate."""
