from config import ApplicationConfig

# bcrypt at cost 4 keeps the suite fast; production default stays at 12
ApplicationConfig.BCRYPT_ROUNDS = 4
