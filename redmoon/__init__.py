"""Tools for the sprite sheets ("resource files") of Redmoon Online."""
