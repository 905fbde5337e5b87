# Static demo data used by the in-memory backend when no Supabase project is
# configured.

SEED_CREDENTIALS = {
    "admin@edumanage.com": "admin123",
    "sophie.leroy@edumanage.com": "teacher123",
    "marc.petit@edumanage.com": "teacher123",
    "marie.martin@email.com": "parent123",
    "pierre.dubois@email.com": "parent123",
    "claire.bernard@email.com": "parent123",
    "alice.martin@email.com": "student123",
}

SEED_DATA = {
    "users": [
        {"id": "admin-1", "email": "admin@edumanage.com", "first_name": "Admin", "last_name": "EduManage",
         "role": "admin", "created_at": "2024-01-01T09:00:00"},
        {"id": "teacher-1", "email": "sophie.leroy@edumanage.com", "first_name": "Sophie", "last_name": "Leroy",
         "role": "teacher", "phone": "+33612345678", "created_at": "2024-01-05T09:00:00"},
        {"id": "teacher-2", "email": "marc.petit@edumanage.com", "first_name": "Marc", "last_name": "Petit",
         "role": "teacher", "created_at": "2024-01-06T09:00:00"},
        {"id": "parent-1", "email": "marie.martin@email.com", "first_name": "Marie", "last_name": "Martin",
         "role": "parent", "phone": "+33123456789", "created_at": "2024-01-15T10:00:00"},
        {"id": "parent-2", "email": "pierre.dubois@email.com", "first_name": "Pierre", "last_name": "Dubois",
         "role": "parent", "created_at": "2024-02-01T10:00:00"},
        {"id": "parent-3", "email": "claire.bernard@email.com", "first_name": "Claire", "last_name": "Bernard",
         "role": "parent", "created_at": "2024-01-20T10:00:00"},
        {"id": "student-user-1", "email": "alice.martin@email.com", "first_name": "Alice", "last_name": "Martin",
         "role": "student", "created_at": "2024-01-15T10:30:00"},
    ],
    "teachers": [
        {"id": "teacher-1", "first_name": "Sophie", "last_name": "Leroy", "email": "sophie.leroy@edumanage.com",
         "subjects": ["Mathématiques", "Physique", "Chimie"], "hourly_rate": 30, "experience_years": 8,
         "bio": "Professeure de sciences, spécialisée dans la préparation au brevet et au bac."},
        {"id": "teacher-2", "first_name": "Marc", "last_name": "Petit", "email": "marc.petit@edumanage.com",
         "subjects": ["Français", "Histoire"], "hourly_rate": 45, "experience_years": 12},
    ],
    "students": [
        {"id": "student-1", "user_id": "student-user-1", "first_name": "Alice", "last_name": "Martin",
         "date_of_birth": "2010-05-15", "level": "4ème", "subjects": ["Mathématiques", "Physique"],
         "parent_ids": ["parent-1"], "teacher_id": "teacher-1", "notes": "Excellente élève, très motivée",
         "learning_goals": ["Améliorer en algèbre", "Préparer le brevet"], "created_at": "2024-01-15T10:30:00"},
        {"id": "student-2", "first_name": "Lucas", "last_name": "Dubois", "date_of_birth": "2011-08-22",
         "level": "3ème", "subjects": ["Français", "Histoire"], "parent_ids": ["parent-2"],
         "teacher_id": "teacher-2", "notes": "Besoin de plus de confiance en soi",
         "learning_goals": ["Améliorer l'expression écrite"], "created_at": "2024-02-01T10:30:00"},
        {"id": "student-3", "first_name": "Emma", "last_name": "Bernard", "date_of_birth": "2009-12-10",
         "level": "2nde", "subjects": ["Mathématiques", "Chimie"], "parent_ids": ["parent-3"],
         "teacher_id": "teacher-1", "learning_goals": ["Préparer le bac scientifique"],
         "created_at": "2024-01-20T10:30:00"},
    ],
    "parents": [
        {"id": "parent-1", "first_name": "Marie", "last_name": "Martin", "email": "marie.martin@email.com",
         "phone": "+33123456789", "address": "12 rue de la Paix, 75001 Paris", "children": ["student-1"]},
        {"id": "parent-2", "first_name": "Pierre", "last_name": "Dubois", "email": "pierre.dubois@email.com",
         "children": ["student-2"], "notifications": {"email": True, "sms": True, "push": False}},
        {"id": "parent-3", "first_name": "Claire", "last_name": "Bernard", "email": "claire.bernard@email.com",
         "children": ["student-3"]},
    ],
    "courses": [
        {"id": "course-1", "title": "Mathématiques - Algèbre", "description": "Révision des équations du second degré",
         "date": "2024-12-20T14:00:00", "duration": 60, "subject": "Mathématiques",
         "student_ids": ["student-1", "student-3"], "teacher_id": "teacher-1", "status": "scheduled",
         "price": 30, "location": "Salle 1"},
        {"id": "course-2", "title": "Français - Rédaction", "date": "2024-12-18T10:00:00", "duration": 90,
         "subject": "Français", "student_ids": ["student-2"], "teacher_id": "teacher-2", "status": "completed",
         "price": 45, "location": "Salle 2"},
        {"id": "course-3", "title": "Physique - Mécanique", "date": "2024-12-16T16:00:00", "duration": 60,
         "subject": "Physique", "student_ids": ["student-1"], "teacher_id": "teacher-1", "status": "completed",
         "price": 30},
        {"id": "course-4", "title": "Chimie - Réactions", "date": "2024-12-17T15:00:00", "duration": 60,
         "subject": "Chimie", "student_ids": ["student-3"], "teacher_id": "teacher-1", "status": "cancelled",
         "price": 30, "notes": "Annulé par la famille"},
    ],
    "grades": [
        {"id": "grade-1", "student_id": "student-1", "course_id": "course-3", "teacher_id": "teacher-1",
         "subject": "Physique", "grade": 16, "max_grade": 20, "weight": 1, "type": "exam", "date": "2024-12-16"},
        {"id": "grade-2", "student_id": "student-1", "course_id": "course-1", "teacher_id": "teacher-1",
         "subject": "Mathématiques", "grade": 15, "max_grade": 20, "weight": 1, "type": "quiz", "date": "2024-12-10"},
        {"id": "grade-3", "student_id": "student-1", "course_id": "course-1", "teacher_id": "teacher-1",
         "subject": "Mathématiques", "grade": 12, "max_grade": 20, "weight": 2, "type": "exam", "date": "2024-12-12"},
        {"id": "grade-4", "student_id": "student-2", "course_id": "course-2", "teacher_id": "teacher-2",
         "subject": "Français", "grade": 14, "max_grade": 20, "weight": 1, "type": "homework", "date": "2024-12-18"},
        {"id": "grade-5", "student_id": "student-3", "course_id": "course-1", "teacher_id": "teacher-1",
         "subject": "Mathématiques", "grade": 9, "max_grade": 10, "weight": 1, "type": "quiz", "date": "2024-12-11",
         "comment": "Très bon travail"},
    ],
    "invoices": [
        {"id": "invoice-1", "invoice_number": "INV-2024-001", "teacher_id": "teacher-1", "parent_id": "parent-1",
         "student_id": "student-1", "course_ids": ["course-3"], "amount": 30, "status": "paid",
         "due_date": "2024-12-31", "paid_date": "2024-12-17", "payment_method": "card",
         "items": [{"description": "Physique - Mécanique", "quantity": 1, "unit_price": 30, "total": 30}],
         "created_at": "2024-12-16T18:00:00"},
        {"id": "invoice-2", "invoice_number": "INV-2024-002", "teacher_id": "teacher-2", "parent_id": "parent-2",
         "student_id": "student-2", "course_ids": ["course-2"], "amount": 65, "status": "sent",
         "due_date": "2025-01-15", "discount": 10,
         "items": [{"description": "Cours de français", "quantity": 2, "unit_price": 15, "total": 30},
                   {"description": "Atelier rédaction", "quantity": 1, "unit_price": 45, "total": 45}],
         "created_at": "2024-12-18T12:00:00"},
        {"id": "invoice-3", "invoice_number": "INV-2024-003", "teacher_id": "teacher-1", "parent_id": "parent-3",
         "student_id": "student-3", "course_ids": ["course-4"], "amount": 30, "status": "overdue",
         "due_date": "2024-12-01",
         "items": [{"description": "Chimie - Réactions", "quantity": 1, "unit_price": 30, "total": 30}],
         "created_at": "2024-11-20T12:00:00"},
    ],
    "messages": [
        {"id": "message-1", "sender_id": "teacher-1", "receiver_id": "parent-1", "subject": "Progrès d'Alice",
         "content": "Alice a fait d'excellents progrès en algèbre ce mois-ci.", "read": False,
         "created_at": "2024-12-15T18:00:00"},
        {"id": "message-2", "sender_id": "parent-2", "receiver_id": "teacher-2", "subject": "Absence",
         "content": "Lucas sera absent la semaine prochaine.", "read": True, "thread_id": "thread-2",
         "created_at": "2024-12-14T09:00:00"},
    ],
    "attendance": [
        {"id": "attendance-1", "student_id": "student-1", "course_id": "course-3", "status": "present"},
        {"id": "attendance-2", "student_id": "student-2", "course_id": "course-2", "status": "late",
         "notes": "10 minutes de retard"},
    ],
}
