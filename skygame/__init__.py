"""Systems for a small side-scrolling game: reflection-driven configuration, asset loaders, camera, input and a live edit server."""

__version__ = "0.1.0"