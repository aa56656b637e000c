"""
The top of the language: the project declaration and the global properties.

A file is an optional run of macro definitions, then exactly one ``project``
declaration, then any number of global properties (tasks, resources, reports...).
The global properties may also appear inside the project's braces.
"""

from ..grammar.builders import options_rule
from ..grammar.registry import Registry
from ..grammar.symbols import K, N, INTEGER, STRING, DATE
from ..model.project import Project
from ..model.scheduling import RealFormat, Vacation
from ..scanning.tokens import Macro
from .common import date_text

ROOT = 'file'

FORMAT_ARGS = {
	1:('negativeprefix', 'Prefix for negative numbers'),
	2:('negativesuffix', 'Suffix for negative numbers'),
	3:('thousandsep', 'Separator used for every 3rd digit'),
	4:('fractionsep', 'Separator used to separate the fraction digits'),
	5:('fractiondigits', 'Number of fraction digits to show'),
}

def declare(grammar:Registry):
	grammar.define_rule(ROOT)
	grammar.define_rule('leadingMacros', optional=True, repeatable=True)
	grammar.pattern('leadingMacros', N('macro'))(None)
	@grammar.pattern(ROOT, N('leadingMacros'), N('projectDeclaration'), N('properties'))
	def whole_file(ctx, macros, project, properties): return project

	grammar.define_rule('projectDeclaration')
	grammar.pattern('projectDeclaration', N('projectHeader'), N('projectBody'), keyword='project', doc="""
		The project property is mandatory and must be the first property in a project
		file. It captures basic attributes such as the project id, name and time frame.
	""")(lambda ctx, project, body: project)

	grammar.define_rule('projectHeader')
	@grammar.pattern('projectHeader', K('project'), N('newId'), STRING, STRING, N('interval'), args={
		1:('id', 'The ID of the project'),
		2:('name', 'The name of the project'),
		3:('version', 'The version of the project plan'),
	})
	def project_header(ctx, id, name, version, interval):
		project = ctx.project = Project(id, name, version)
		project['start'], project['end'] = interval
		ctx.source.add_macro(Macro('projectstart', date_text(interval.start), ctx.location))
		ctx.source.add_macro(Macro('projectend', date_text(interval.end), ctx.location))
		ctx.source.add_macro(Macro('now', date_text(project['now']), ctx.location))
		return project

	options_rule(grammar, 'projectBody', 'projectBodyAttributes')
	grammar.define_rule('projectBodyAttributes', optional=True, repeatable=True)
	body = 'projectBodyAttributes'

	@grammar.pattern(body, K('currencyformat'), STRING, STRING, STRING, STRING, STRING, keyword='currencyformat', doc="""
		These values specify the default format used for all currency values.
	""", args=FORMAT_ARGS)
	def currency_format(ctx, *fields): ctx.project['currencyformat'] = RealFormat(*fields)

	@grammar.pattern(body, K('currency'), STRING, keyword='currency', doc="The default currency unit.", args={1:('symbol', 'Currency symbol')})
	def currency(ctx, symbol): ctx.project['currency'] = symbol

	@grammar.pattern(body, K('dailyworkinghours'), N('number'), keyword='dailyworkinghours', doc="""
		Set the average number of working hours per day. This is the base for converting
		working hours into working days. The default is 8 hours.
	""", args={1:('hours', 'Average number of working hours per working day')})
	def daily_working_hours(ctx, hours): ctx.project['dailyworkinghours'] = hours

	grammar.pattern(body, K('extend'), N('extendProperty'), N('extendBody'), keyword='extend', doc="""
		Extends tasks or resources with user-defined attributes of type text, date or
		reference. Optionally the value is inherited from the enclosing property, and
		can differ from one scenario to the next.
	""")(None)

	grammar.pattern(body, N('include'))(None)

	@grammar.pattern(body, K('now'), DATE, keyword='now', doc="""
		Specify the date used as the current date for all calculations. If no value is
		specified, the current value of the system clock is used.
	""", args={1:('date', 'Alternative date to be used as current date')})
	def now(ctx, moment):
		ctx.project['now'] = moment
		ctx.source.add_macro(Macro('now', date_text(moment), ctx.location))

	@grammar.pattern(body, K('numberformat'), STRING, STRING, STRING, STRING, STRING, keyword='numberformat', doc="""
		These values specify the default format used for all numerical real values.
	""", args=FORMAT_ARGS)
	def number_format(ctx, *fields): ctx.project['numberformat'] = RealFormat(*fields)

	grammar.pattern(body, N('scenario'))(None)

	@grammar.pattern(body, K('shorttimeformat'), STRING, keyword='shorttimeformat', doc="Time format for short time specifications.", args={1:('format', 'strftime like format string')})
	def short_time_format(ctx, text): ctx.project['shorttimeformat'] = text

	@grammar.pattern(body, K('timeformat'), STRING, keyword='timeformat', doc="How time specifications in reports look.", args={1:('format', 'strftime like format string')})
	def time_format(ctx, text): ctx.project['timeformat'] = text

	@grammar.pattern(body, N('timezone'))
	def timezone(ctx, zone): ctx.project['timezone'] = zone

	@grammar.pattern(body, K('timingresolution'), INTEGER, K('min'), keyword='timingresolution', doc="""
		Sets the minimum timing resolution: at least 5 minutes and at most one hour, which
		is also the default. Set it before any value that depends on it.
	""", args={1:('resolution', 'The minimum interval that the scheduler uses to align tasks')})
	def timing_resolution(ctx, minutes):
		if minutes < 5: ctx.error('min_timing_res', 'Timing resolution must be at least 5 min.')
		if minutes > 60: ctx.error('max_timing_res', 'Timing resolution must be 1 hour or less.')
		ctx.project['scheduleGranularity'] = minutes * 60

	@grammar.pattern(body, K('weekstartsmonday'), keyword='weekstartsmonday', doc="Base all week calculations on weeks starting on Monday.")
	def week_starts_monday(ctx): ctx.project['weekstartsmonday'] = True

	@grammar.pattern(body, K('weekstartssunday'), keyword='weekstartssunday', doc="Base all week calculations on weeks starting on Sunday.")
	def week_starts_sunday(ctx): ctx.project['weekstartsmonday'] = False

	@grammar.pattern(body, K('yearlyworkingdays'), N('number'), keyword='yearlyworkingdays', doc="""
		The average number of working days per year. It affects the conversion of working
		days, weeks, months and years into each other. The default is 260.714.
	""", args={1:('days', 'Number of average working days for a year')})
	def yearly_working_days(ctx, days): ctx.project['yearlyworkingdays'] = days

	grammar.pattern(body, N('globalProperty'))(None)

	grammar.define_rule('properties', optional=True, repeatable=True)
	grammar.pattern('properties', N('globalProperty'))(None)
	grammar.pattern('properties', N('include'))(None)
	grammar.pattern('properties', N('macro'))(None)

	grammar.define_rule('globalProperty')
	glob = 'globalProperty'

	@grammar.pattern(glob, K('copyright'), STRING, keyword='copyright', doc="A copyright notice for the reports.")
	def copyright_notice(ctx, text): ctx.project['copyright'] = text

	grammar.pattern(glob, N('export'))(None)

	@grammar.pattern(glob, K('flags'), N('declareFlagList'), keyword='flags', doc="""
		Declare flags. Tasks and resources may only be tagged with declared flags.
	""")
	def declare_flags(ctx, names):
		known = ctx.project['flags']
		for name in names:
			if name in known: ctx.warning('flag_redeclared', "Flag %s has already been declared."%name)
		ctx.project['flags'] = known + [n for n in dict.fromkeys(names) if n not in known]

	grammar.pattern(glob, N('htmlResourceReport'))(None)
	grammar.pattern(glob, N('htmlTaskReport'))(None)
	grammar.pattern(glob, N('resource'))(None)
	grammar.pattern(glob, K('supplement'), N('supplement'), keyword='supplement', doc="""
		Add more attributes to a task or resource declared earlier.
	""")(None)
	grammar.pattern(glob, N('task'))(None)

	@grammar.pattern(glob, K('vacation'), N('vacationName'), N('intervals'), keyword='vacation', doc="""
		Global vacations apply to every resource.
	""")
	def global_vacation(ctx, name, intervals):
		ctx.project['vacations'] = ctx.project['vacations'] + [Vacation(name, iv) for iv in intervals]

	grammar.pattern(glob, N('workinghours'))(None)
