from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('storefront', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Color',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, unique=True, verbose_name='Nombre')),
                ('hex_code', models.CharField(blank=True, help_text='#RRGGBB', max_length=7, null=True, verbose_name='Código HEX')),
            ],
            options={
                'verbose_name': 'Color',
                'verbose_name_plural': 'Colores',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='ProductColorImage',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('images', models.JSONField(blank=True, default=list, verbose_name='Imágenes')),
                ('is_primary', models.BooleanField(default=False, verbose_name='Principal')),
                ('sort_order', models.PositiveIntegerField(default=0, verbose_name='Orden')),
                ('color', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='product_images', to='productcolors.color')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='color_images', to='storefront.product')),
            ],
            options={
                'verbose_name': 'Imagen por color',
                'verbose_name_plural': 'Imágenes por color',
                'ordering': ['sort_order', 'id'],
                'unique_together': {('product', 'color')},
                'indexes': [
                    models.Index(fields=['product', 'sort_order'], name='idx_colorimg_product_order'),
                    models.Index(fields=['product', 'is_primary'], name='idx_colorimg_primary'),
                ],
            },
        ),
    ]
