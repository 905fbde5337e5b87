MESSAGES = {
    "en": {
        "invalid_credentials": "Invalid login credentials",
        "invalid_token": "Invalid token",
        "invalid_token_format": "Invalid token format",
        "session_expired": "Session expired",
        "user_not_found": "User not found",
        "account_disabled": "This account has been deactivated",
        "service_unavailable": "The service is temporarily unavailable. Please try again later.",
        "forbidden": "This screen is not available for your role",
        "unknown_role": "Unknown role",
        "password_change_disabled": "Password changes are disabled for this account",
        "password_updated": "Password updated",
        "invalid_range": "Both start and end are required, with end after start",
        "student_not_found": "Student not found",
        "teacher_not_found": "Teacher not found",
        "parent_not_found": "Parent not found",
        "course_not_found": "Course not found",
        "grade_not_found": "Grade not found",
        "invoice_not_found": "Invoice not found",
        "message_not_found": "Message not found",
        "attendance_not_found": "Attendance record not found",
    },
    "fr": {
        "invalid_credentials": "Identifiants de connexion invalides",
        "invalid_token": "Jeton invalide",
        "invalid_token_format": "Format de jeton invalide",
        "session_expired": "Session expirée",
        "user_not_found": "Utilisateur introuvable",
        "account_disabled": "Ce compte a été désactivé",
        "service_unavailable": "Une erreur est survenue, veuillez réessayer plus tard.",
        "forbidden": "Cet écran n'est pas disponible pour votre rôle",
        "unknown_role": "Rôle inconnu",
        "password_change_disabled": "Le changement de mot de passe est désactivé pour ce compte",
        "password_updated": "Mot de passe mis à jour",
        "invalid_range": "Le début et la fin sont requis, la fin doit suivre le début",
        "student_not_found": "Élève introuvable",
        "teacher_not_found": "Enseignant introuvable",
        "parent_not_found": "Parent introuvable",
        "course_not_found": "Cours introuvable",
        "grade_not_found": "Note introuvable",
        "invoice_not_found": "Facture introuvable",
        "message_not_found": "Message introuvable",
        "attendance_not_found": "Présence introuvable",
    },
}

# Entity kind -> message shown when a record of that kind is missing
NOT_FOUND_KEYS = {
    "users": "user_not_found",
    "teachers": "teacher_not_found",
    "students": "student_not_found",
    "parents": "parent_not_found",
    "courses": "course_not_found",
    "grades": "grade_not_found",
    "invoices": "invoice_not_found",
    "messages": "message_not_found",
    "attendance": "attendance_not_found",
}


def message(key: str, locale: str = "en") -> str:
    catalog = MESSAGES.get(locale, MESSAGES["en"])
    return catalog.get(key) or MESSAGES["en"].get(key, key)
