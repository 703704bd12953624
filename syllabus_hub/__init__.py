"""Campus Syllabus Hub - academic resource discovery API"""

__version__ = "1.0.0"
