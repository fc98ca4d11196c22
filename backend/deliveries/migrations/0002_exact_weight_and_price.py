from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('deliveries', '0001_initial'),
    ]

    # weight and price are stored exactly as entered, never rounded
    operations = [
        migrations.AlterField(
            model_name='delivery',
            name='weight_kg',
            field=models.DecimalField(decimal_places=6, max_digits=18),
        ),
        migrations.AlterField(
            model_name='delivery',
            name='price_per_kg',
            field=models.DecimalField(decimal_places=6, max_digits=18),
        ),
        migrations.AlterField(
            model_name='delivery',
            name='total_ariary',
            field=models.DecimalField(decimal_places=2, max_digits=26),
        ),
    ]
