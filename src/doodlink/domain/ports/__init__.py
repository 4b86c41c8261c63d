from .link_resolver import LinkResolverPort

__all__ = ["LinkResolverPort"]
