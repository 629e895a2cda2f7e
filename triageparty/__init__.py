"""triageparty — collection execution, statistics, and the tag vocabulary."""
