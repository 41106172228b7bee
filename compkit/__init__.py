"""compkit - add UI components from a component registry to your project."""
