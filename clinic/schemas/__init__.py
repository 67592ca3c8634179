# Schemas package (re-export feature modules for stable imports)
from .parties.party import *
from .parties.doctor import *
from .parties.patient import *
from .appointments.appointment import *
from .prescriptions.prescription import *
from .admin.admin import *
from .common.common import *
