"""Command line front end for the credentials resolver."""
