from .codec import contains_any, pack_directory, starts_with_any, unpack_archive

__all__ = ["contains_any", "pack_directory", "starts_with_any", "unpack_archive"]
