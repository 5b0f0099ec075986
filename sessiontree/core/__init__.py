"""Session tree core: store, header reads, tree building and filtering."""
