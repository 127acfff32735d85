"""Engine families for Docnorm: image codecs, PDF writers, PDF compressors, text extractors."""
