"""Routing model — routes, typed default values, and the route table.

Routes are built by the loaders during a single parse pass and collected
into an ordered, name-keyed table handed to the dispatch layer.
"""
