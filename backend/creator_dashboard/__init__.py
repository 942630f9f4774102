"""
Creator dashboard backend: YouTube channel search, statistics and the Creative Coach assistant.
"""
