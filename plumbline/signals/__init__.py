"""Signal detectors for ACMM levels 2 to 4, and fixers for the level 2 signals."""