# Models package init
"""ORM models; importing a module registers its table on `Base.metadata`."""
