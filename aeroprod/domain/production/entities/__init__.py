from .aircraft import Aircraft
from .employee import Employee
from .part import Part
from .quality_test import QualityTest
from .stage import Stage

__all__ = ["Aircraft", "Employee", "Part", "QualityTest", "Stage"]
