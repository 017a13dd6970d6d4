"""Fixed lending parameters shared by the amortization and eligibility engines"""

from typing import List

# 20% annual rate, charged monthly
ANNUAL_INTEREST_RATE = 0.2
MONTHLY_INTEREST_RATE = ANNUAL_INTEREST_RATE / 12

# Assumed monthly debt-service capacity of a borrower (KRW)
CAPACITY = 550_000

# EMIs are rounded up to this unit (KRW)
PAYMENT_ROUNDING_UNIT = 1_000

# Loan must mature this many months before the visa expires
VISA_BUFFER_MONTHS = 3

MIN_LOAN_DURATION = 3
MAX_LOAN_DURATION = 180

LOAN_AMOUNT_STEP = 1_000_000

# Candidate grid offered to borrowers: 2,000,000 ~ 40,000,000
LOAN_AMOUNTS: List[int] = [i * LOAN_AMOUNT_STEP for i in range(2, 41)]
LOAN_DURATIONS: List[int] = list(range(MIN_LOAN_DURATION, MAX_LOAN_DURATION + 1))
