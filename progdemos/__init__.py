"""Small programs and libraries: expression evaluation, bit-vector sets, geometry, HTML and XML tools, concurrency utilities and network services."""

__version__ = "0.1.0"