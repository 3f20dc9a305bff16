"""HTTP interface to terrain generation."""
