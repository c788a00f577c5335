"""House rules for termjack. These are fixed and not configurable."""

# Betting
MIN_BET = 50
BET_STEP = 25

# Payouts
BLACKJACK_PAYOUT = 1.5

# Totals
BLACKJACK_TOTAL = 21
DEALER_STAND_TOTAL = 17

# Profile defaults for a first run
STARTING_CHIPS = 1000
