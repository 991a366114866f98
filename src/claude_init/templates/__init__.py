"""External template lookup, embedded templates and authoring guides."""
