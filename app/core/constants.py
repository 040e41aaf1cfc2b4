# app/core/constants.py

from app.models.enums import Campus

# ==========================================================
# PERSONAL DETAILS FORM
# ==========================================================
REQUIRED_FIELDS = [
    "fullName", "middleName", "lastName", "gender", "dob",
    "pob", "address", "phone", "email", "fatherName", "motherName", "chooseBCA",
]

MSG_REQUIRED = "This field is required"
MSG_INVALID_EMAIL = "Please enter a valid email address"
MSG_INVALID_PHONE = "Please enter a valid 10-digit phone number"
MSG_INVALID_CAMPUS = "Please select a valid campus"
MSG_FORM_REJECTED = "Please fill all required fields correctly"

# ==========================================================
# FEE STRUCTURE (INR)
# ==========================================================
SEMESTER_COUNT = 8
SURCHARGE_FROM_SEMESTER = 5
SENIOR_SEMESTER_SURCHARGE = 1000

# Siliguri has its own tier; every other campus uses the default tier
SILIGURI_TUITION = 20000
SILIGURI_OTHER_FEES = 5000
SILIGURI_ADMISSION_FEE = 5000

DEFAULT_TUITION = 25000
DEFAULT_OTHER_FEES = 7000
DEFAULT_ADMISSION_FEE = 8000

# ==========================================================
# CAMPUS CATALOGUE
# ==========================================================
CAMPUS_CATALOGUE = {
    Campus.Siliguri: {
        "tagline": "State-of-the-art facilities in a serene environment, "
                   "perfect for focused learning and academic excellence.",
        "facilities": ["Modern Computer Labs", "Digital Library", "Sports Facilities"],
    },
    Campus.Kolkata: {
        "tagline": "Located in the heart of the city, a dynamic learning "
                   "environment with excellent industry connections.",
        "facilities": ["Advanced Technology Center", "Innovation Hub", "Internship Opportunities"],
    },
}
