# models_bootstrap.py
from member import models as _member_models
from pattern import models as _pattern_models
from override import models as _override_models
from timeoff import models as _timeoff_models
