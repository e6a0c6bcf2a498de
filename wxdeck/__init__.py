"""WXDeck: card search and deck legality for the WIXOSS trading card game."""
