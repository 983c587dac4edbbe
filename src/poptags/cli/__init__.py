"""poptags command line."""
