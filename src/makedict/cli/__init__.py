"""
Command-line interface entry points for makedict.

Entry points:
- mkdict-fetch: Download corpus sources into the cache
- mkdict-build: Build ranked dictionaries for configured language pairs
- mkdict-lookup: Query a built dictionary
"""
