"""Infrastructure layer — file readers and the toolchain provider."""
