from enum import Enum

class Step(str, Enum):
    PersonalDetails = "personal_details"
    PersonalDetailsSubmitted = "personal_details_submitted"
    CampusSelection = "campus_selection"
    DetailsAndFees = "details_and_fees"

class BCAChoice(str, Enum):
    Yes = "yes"
    No = "no"

class Campus(str, Enum):
    Siliguri = "Siliguri"
    Kolkata = "Kolkata"
