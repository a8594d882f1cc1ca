from sqlalchemy import Column, Float, Integer, String

from .database import Base


# --- Grade lookup tables ---
# One KGS/Fish-Eye table and one Bowtie table per shape profile, imported
# from the grading spreadsheets. Grade cells are stored as text because the
# sheets contain blanks and "n/a" cells.

class KgsGradeColumns:
    """Rows keyed by the three proportion values. kgs + feye grades."""

    id = Column(Integer, primary_key=True, index=True)
    table_width = Column(Float, nullable=False, index=True)
    crown_angle = Column(Float, nullable=False)
    pavilion_depth = Column(Float, nullable=False)
    kgs = Column(String, nullable=True)
    feye = Column(String, nullable=True)


class BowtieGradeColumns:
    """Rows keyed by crown angle, with an inclusive halves-angle bracket."""

    id = Column(Integer, primary_key=True, index=True)
    crown_angle = Column(Float, nullable=False, index=True)
    halves_min = Column(Float, nullable=False)
    halves_max = Column(Float, nullable=False)
    bowtie = Column(String, nullable=True)


class PearEightMainsKgs(KgsGradeColumns, Base):
    __tablename__ = "pear_8_mains_kgs"


class PearEightMainsBowtie(BowtieGradeColumns, Base):
    __tablename__ = "pear_8_mains_bowtie"


class PearFourMainsKgs(KgsGradeColumns, Base):
    __tablename__ = "pear_4_mains_kgs"


class PearFourMainsBowtie(BowtieGradeColumns, Base):
    __tablename__ = "pear_4_mains_bowtie"


class OvalEightMainsKgs(KgsGradeColumns, Base):
    __tablename__ = "oval_8_mains_kgs"


class OvalEightMainsBowtie(BowtieGradeColumns, Base):
    __tablename__ = "oval_8_mains_bowtie"


class OvalFourMainsKgs(KgsGradeColumns, Base):
    __tablename__ = "oval_4_mains_kgs"


class OvalFourMainsBowtie(BowtieGradeColumns, Base):
    __tablename__ = "oval_4_mains_bowtie"


class MarqEightMainsKgs(KgsGradeColumns, Base):
    __tablename__ = "marq_8_mains_kgs"


class MarqEightMainsBowtie(BowtieGradeColumns, Base):
    __tablename__ = "marq_8_mains_bowtie"


class MarqFourMainsKgs(KgsGradeColumns, Base):
    __tablename__ = "marq_4_mains_kgs"


class MarqFourMainsBowtie(BowtieGradeColumns, Base):
    __tablename__ = "marq_4_mains_bowtie"


# Shape profile name → (KGS/Fish-Eye model, Bowtie model)
GRADE_TABLE_MODELS = {
    "Pear 8 Mains": (PearEightMainsKgs, PearEightMainsBowtie),
    "Pear 4 Mains": (PearFourMainsKgs, PearFourMainsBowtie),
    "Oval 8 Mains": (OvalEightMainsKgs, OvalEightMainsBowtie),
    "Oval 4 Mains": (OvalFourMainsKgs, OvalFourMainsBowtie),
    "Marq 8 Mains": (MarqEightMainsKgs, MarqEightMainsBowtie),
    "Marq 4 Mains": (MarqFourMainsKgs, MarqFourMainsBowtie),
}
