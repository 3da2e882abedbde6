"""Reference frame transformations between the GCRS and the ITRS."""
