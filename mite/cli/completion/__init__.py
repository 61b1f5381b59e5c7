"""Shell tab-completion for the mite command grammar."""
