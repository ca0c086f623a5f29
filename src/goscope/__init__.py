"""Static structure and call-graph analysis for Go projects."""
