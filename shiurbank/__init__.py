"""ShiurBank: a shiur (Torah lecture) audio library with series, recordings and search."""
