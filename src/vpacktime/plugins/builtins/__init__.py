"""Built-in codec modules shipped with vpacktime."""
