"""filedrive: per-user file drive backed by Cloudinary."""

__version__ = "1.0.0"
