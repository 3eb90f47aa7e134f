import yaml

class Configuration(yaml.YAMLObject):
    yaml_tag = u'!Config'

    def __init__(self, input_path,
                       output_path,
                       log_path,
                       innings=6,
                       lineup_size=9,
                       auto_insert_pitcher_change=True,
                       normalize_starting_pitchers=True):
        self.input_path = input_path
        self.output_path = output_path
        self.log_path = log_path
        self.innings = innings
        self.lineup_size = lineup_size
        self.auto_insert_pitcher_change = auto_insert_pitcher_change
        self.normalize_starting_pitchers = normalize_starting_pitchers

    # Fills in defaults for optional keys missing from a yaml document.
    # (YAMLObject construction bypasses __init__.)
    def __setstate__(self, state):
        defaults = {'innings': 6,
                    'lineup_size': 9,
                    'auto_insert_pitcher_change': True,
                    'normalize_starting_pitchers': True}
        defaults.update(state)
        self.__dict__.update(defaults)

    def __repr__(self):
        return """%s(input_path=%r,
                     output_path=%r,
                     log_path=%r,
                     innings=%r,
                     lineup_size=%r,
                     auto_insert_pitcher_change=%r,
                     normalize_starting_pitchers=%r)""" % (
                self.__class__.__name__,
                self.input_path,
                self.output_path,
                self.log_path,
                self.innings,
                self.lineup_size,
                self.auto_insert_pitcher_change,
                self.normalize_starting_pitchers)
