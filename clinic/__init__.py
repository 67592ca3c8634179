# Clinic appointment-booking core
