# timeline_app/config/constants.py

# Constantes para o Nome de Usuário (Username)
USERNAME_LENGTH_MIN = 3
USERNAME_LENGTH_MAX = 100

# Constantes para a Senha
PASSWORD_LENGTH_MIN = 6
PASSWORD_LENGTH_MAX = 128

# Nome completo / e-mail
FULL_NAME_LENGTH_MAX = 255

# Timelines
TIMELINE_NAME_LENGTH_MAX = 255
SLUG_LENGTH_MAX = 120
SLUG_PATTERN = r'^[a-z0-9]+(?:-[a-z0-9]+)*$'

# Gestões / Membros
PERIOD_LENGTH_MAX = 50
MEMBER_NAME_LENGTH_MAX = 500
MEMBER_ROLE_LENGTH_MAX = 100
PHOTO_URL_LENGTH_MAX = 1024

# Formatos de exportação
EXPORT_FORMAT_FULL = 'full'
EXPORT_FORMAT_LEGACY = 'legacy'
