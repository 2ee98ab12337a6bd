"""Static ABI bundle export."""
