"""Host-side bridges for rendering engine output."""
