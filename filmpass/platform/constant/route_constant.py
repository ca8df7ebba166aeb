# Backend API Route Constants (relative to settings.API_BASE_URL)

# Auth routes
AUTH_BASE = '/auth'
AUTH_LOGIN = f'{AUTH_BASE}/login'
AUTH_REGISTER = f'{AUTH_BASE}/register'
AUTH_ME = f'{AUTH_BASE}/me'

# Catalog routes
THEATER_LIST = '/theaters'
MOVIE_LIST = '/movies'
MOVIE_GET = '/movies/{movie_id}'

# Seat routes
SHOWTIME_SEATS = '/showtimes/{showtime_id}/seats'

# Booking routes
BOOKING_CREATE = '/bookings'

# Payment routes
PAYMENT_CHECKOUT_SESSION = '/create-checkout-session'
PAYMENT_VERIFY = '/verify-payment'

# Application routes (payment provider redirects back here)
APP_PAYMENT_BASE = '/payment'
APP_PAYMENT_SUCCESS = f'{APP_PAYMENT_BASE}/success'
APP_PAYMENT_CANCEL = f'{APP_PAYMENT_BASE}/cancel'
