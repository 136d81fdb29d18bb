# ABOUTME: olmeta resolves book lookups against Open Library into canonical metadata records.
# ABOUTME: Exposes the package version; the engine lives in olmeta.metadata.

__version__ = "0.1.0"
