"""Transaction export rendering."""
