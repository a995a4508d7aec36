"""Recipe document parsers: extraction layers, platform detectors and merge coordination."""
